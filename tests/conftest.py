"""
Shared test setup.

Surfaces are QImages, which need a running Qt application. Tests run
headless on the offscreen platform.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtGui import QGuiApplication

_app = QGuiApplication.instance() or QGuiApplication([])
