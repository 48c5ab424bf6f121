"""stationctl - Declarative workstation provisioning for macOS.

Captures the installed software of a developer machine, matches it against
a built-in catalog of presets, and reconciles the machine with a desired state.
"""

__version__ = "0.1.0"
