"""
Super Simple Stocks (gbce)

A toy Global Beverage Corporation Exchange simulator. It tracks a fixed set
of stocks, records trades entered at an interactive prompt, and derives
prices, dividend yields, P/E ratios and the GBCE all-share index from them.

All state is in memory for the lifetime of one session.
"""

__version__ = "0.1.0"
__author__ = "GBCE Simulator Team"
