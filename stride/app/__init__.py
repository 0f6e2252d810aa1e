"""Stride application shell."""
