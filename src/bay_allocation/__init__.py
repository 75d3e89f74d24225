"""
Bay-level slot allocation for warehouse pick data.

Run with: python -m bay_allocation.cli
"""
