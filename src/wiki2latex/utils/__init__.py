#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared by the wiki2latex core."""
