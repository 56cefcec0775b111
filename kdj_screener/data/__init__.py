"""
Price bar models, record loading and series inspection.

Bars enter the system here and flow on to the indicator engine unchanged.
"""
