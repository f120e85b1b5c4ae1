"""Unit tests configuration file."""

import logging


def pytest_configure(config):
    """Hide file paths in test output and capture debug logs from esmodels."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False
    logging.getLogger("esmodels").setLevel(logging.DEBUG)
