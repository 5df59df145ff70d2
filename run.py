# run.py
from __future__ import annotations
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent / "src"))
from importlib import import_module
cli = import_module("ruled_table_extractor.cli")

# La configuración del logging se hace en cli.main.

if __name__ == "__main__":
    sys.exit(cli.main())
