"""
Deterministic export rules.

This file exists to make the fixed policy of an export run explicit.
"""

import re

CATEGORY_PREFIX = "Icons/"  # only assets imported from this origin folder
BASE_CODEPOINT = 0xE900  # start of the private-use range we hand out
MAX_CODEPOINT = 0x10FFFF
ASSET_DIR = "./assets"

IDENTIFIER_PATTERN = re.compile(r"^[a-z][A-Za-z0-9]*$")
UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9 ]")
