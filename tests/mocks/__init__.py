"""Test doubles for iblm."""
