"""Player state model, broadcast wire codec and session tracking for multiplayer ALTTP sync."""

__version__ = "0.1.0"

__all__ = ["registry", "player", "names", "codec", "decode", "session"]