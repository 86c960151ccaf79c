"""
Order Seeder - synthetic order generator for Shopify stores

Author: TM3
Date: 2026-10-18
"""

__version__ = "1.0.0"
