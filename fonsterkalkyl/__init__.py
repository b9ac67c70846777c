"""Offertkalkylator för fönsterrenovering: prislista, partiprissättning och anbudssummor."""

__version__ = "0.1.0"
