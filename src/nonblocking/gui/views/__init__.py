# src/nonblocking/gui/views/__init__.py
"""NiceGUI views: the progress controls and the settings panel."""

from nonblocking.gui.views.options_view import OptionsView
from nonblocking.gui.views.progress_view import ProgressView

__all__ = ["OptionsView", "ProgressView"]
