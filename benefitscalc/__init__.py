"""Benefits Calc - Section 125 benefit and tax-savings projections."""

__version__ = "0.4.0"
