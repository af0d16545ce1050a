# =============================================================================
# polyembed/cli/__init__.py - CLI Module Overview
# =============================================================================
#
# Command-line access to the embedding providers, mainly for checking which
# backend the current environment resolves to and smoke-testing it:
#
#   python -m polyembed.cli providers      # registered provider names
#   python -m polyembed.cli info           # resolved provider + model info
#   python -m polyembed.cli embed "text"   # embed one or more texts
#
# See embed.py for the argument parser and command implementations.
# =============================================================================
