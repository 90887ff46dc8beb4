"""Tkinter UI components.

Submodules are imported directly (``catan_hotseat.ui.app``) so that the
theme helpers stay importable on interpreters built without Tk.
"""
