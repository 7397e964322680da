"""Library Catalogue - Utilities Package

This package contains helpers shared by the core and the CLI:
- Field validators (validators.py)
- Output-mode aware rendering (ui_helpers.py)
"""
