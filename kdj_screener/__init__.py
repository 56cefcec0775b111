"""
KDJ Screener - Stochastic Oscillator Screening Engine

Derives the smoothed stochastic oscillator (K/D/J) for equity price series
and filters a universe of instruments against a threshold on J.
"""

__version__ = "0.1.0"
__author__ = "KDJ Screener Team"
