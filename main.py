"""KeyForge giriş noktası."""

from keyforge.cli import main

if __name__ == "__main__":
    main()
