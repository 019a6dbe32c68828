"""Entry point for the Snake Arcade game."""

from snake_arcade.__main__ import main

if __name__ == "__main__":
    main()
