"""
Allocation core: slot size lookup, location -> bay resolution, bay
inventories, FIFO-by-recency slot allocation and integrity validation.

No file I/O in this package; readers live in data/, writers in presentation/.
"""
