"""Integration tests for git-integrate.

These tests run the real git executable against temporary repositories.

Run with: pytest tests/integration/ -v -m integration
"""
