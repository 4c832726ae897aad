"""Calculation engines.

The performance engine turns environmental inputs into corrected takeoff and
landing distances; the weight and balance engine turns a loading into
weights, moments and a center of gravity. Both are pure functions of their
inputs plus the read-only performance table.
"""
