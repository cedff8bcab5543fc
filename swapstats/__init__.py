"""
    Swap space and paging activity collection for the system swap check.
"""
