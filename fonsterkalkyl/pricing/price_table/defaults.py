"""Hardcoded price list used when neither the sheet nor the local cache is available."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_PRICE_ROW: Mapping[str, Any] = MappingProxyType(
    {
        # Fönster och dörrar (kr, exkl. moms)
        "dorrparti": 5000,
        "pardorr_balong_altan": 9000,
        "kallare_glugg": 3500,
        "flak_bas": 6000,
        # Luftare
        "luftare_1_pris": 4000,
        "luftare_2_pris": 5500,
        "luftare_3_pris": 8250,
        "luftare_4_pris": 11000,
        "luftare_5_pris": 13750,
        "luftare_6_pris": 16500,
        # Renoveringstyp (multiplikatorer)
        "renov_modern_alcro_mult": 1.00,
        "renov_trad_linolja_mult": 1.15,
        # Fönsteröppning (multiplikatorer)
        "oppning_inat_mult": 1.00,
        "oppning_utat_mult": 1.05,
        # Fönstertyp (delta per båge, kr)
        "typ_kopplade_standard_delta": 0,
        "typ_kopplade_isolerglas_delta": 500,
        "typ_isolerglas_delta": -400,
        "typ_insats_yttre_delta": -400,
        "typ_insats_inre_delta": -1250,
        "typ_insats_komplett_delta": 1000,
        # Arbetsbeskrivning (multiplikatorer)
        "arb_utvandig_mult": 1.00,
        "arb_invandig_mult": 1.25,
        "arb_utv_plus_innermal_mult": 1.05,
        # Spröjs (kr per ruta)
        "sprojs_low_price": 250,
        "sprojs_high_price": 400,
        "sprojs_threshold": 3,
        # LE-glas och extra flak (kr)
        "le_glas_per_kvm": 2500,
        "flak_extra_1": 2750,
        "flak_extra_2": 5500,
        "flak_extra_3": 8250,
        "flak_extra_4": 11000,
        "flak_extra_5": 13750,
        # Moms (%)
        "vat": 25,
        "version": 1,
    }
)
