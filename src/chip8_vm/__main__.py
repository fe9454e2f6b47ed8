"""Allow ``python -m chip8_vm``."""

from .cli import main

main()
