"""UI package for the Dokumentovač terminal interface.

This package provides the documents view: query state, presenters and
ViewModels, plus the Textual screens that render them.
"""
