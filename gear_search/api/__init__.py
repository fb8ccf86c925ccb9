"""HTTP hosting layer for Gear Search"""
