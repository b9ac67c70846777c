#!/usr/bin/env python3
"""
Start script for the Fönsterkalkyl API
"""
import os
import subprocess
import sys


def main():
    host = os.getenv("HOST", "0.0.0.0")
    port = os.getenv("PORT", "8000")

    print("🚀 Starting Fönsterkalkyl with uvicorn...")
    print(f"  API: http://localhost:{port}/api/quote")
    print(f"  Prometheus metrics: http://localhost:{port}/metrics")
    print("\n  Press Ctrl+C to stop")

    try:
        subprocess.run(
            [
                sys.executable, "-m", "uvicorn",
                "fonsterkalkyl.main:app",
                "--host", host,
                "--port", port,
            ],
            check=True,
        )
    except KeyboardInterrupt:
        print("\n\n🛑 Application stopped by user")
    except subprocess.CalledProcessError as e:
        print(f"\n❌ uvicorn exited with code {e.returncode}")
        sys.exit(e.returncode)


if __name__ == "__main__":
    main()
