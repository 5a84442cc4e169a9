"""
Statistical reports over the airline on-time performance data: airports,
carriers, planes and one flight file per year.
"""
