"""Integration tests for ADF ↔ markdown conversion.

These tests run the converter end to end: whole documents through both
directions, and directories of files through FileConverter on a temporary
filesystem. No external services are involved.
"""
