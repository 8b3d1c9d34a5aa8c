"""
Shared constants for the project.

This module contains the grammar constants of the source catalogue that should
have a single source of truth. config/parsing.yaml may override any of them.
"""

# Currency marker used in every price of the source catalogue
# U+09F3 BENGALI RUPEE SIGN (taka)
CURRENCY_MARKER = "৳"

# The list separator and the thousands-grouping separator are the same character
LIST_SEPARATOR = ","

# Prefix of the flat-price form ("Unit Price: ৳ 8.00"), no physical container
FLAT_PRICE_PREFIX = "Unit Price:"

# Where a pack-size fragment starts inside a container descriptor
PACK_FRAGMENT_MARKER = ",("

# Boundary between two pack-size blocks: "(10's pack: ৳ 50.00),(20's pack: ৳ 95.00)"
BLOCK_BOUNDARY = "),("

# Unit quantifier that terminates the pack count ("100's")
UNIT_QUANTIFIER = "'"

# Source values that stand in for a container description and carry no price
SENTINEL_DESCRIPTIONS = ("Not for sale", "Price Unavailable")

# Highest segment counts observed in the source data
MAX_PRICED_SEGMENTS = 7
MAX_PLAIN_SEGMENTS = 3
MAX_PACK_BLOCKS = 3
