"""Task assignment strategies and redistribution."""
