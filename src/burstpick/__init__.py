"""burstpick - find photo bursts and keep the best shot of each."""

__version__ = "0.1.0"
