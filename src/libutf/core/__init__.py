# SPDX-License-Identifier: MIT
"""Core codec engine for libutf."""
