"""Allowance schedule configuration backed by YAML data files."""
