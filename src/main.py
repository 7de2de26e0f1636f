"""Script de ejecución de la CLI en desarrollo.

Se usa como `python -m main ...` desde `src/`. El script instalado por `pip`
(`healthclinic`) apunta directamente a `cli.main:run`.
"""

from __future__ import annotations

import sys

# Terminales Windows con cp1252 rompen los caracteres de Rich.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
