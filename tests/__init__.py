################################################################################
# File Name: __init__.py
# Purpose/Description: Test package for the startup orchestrator
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
################################################################################

"""
Tests for the Tasklight startup packages.

Shared fixtures live in conftest.py, file builders in test_utils.py.

Run tests with:
    pytest tests/
    pytest tests/ -m "not integration"
"""
