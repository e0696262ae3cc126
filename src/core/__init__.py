"""
Core numeric primitives and contracts.

Checked fixed-width integers and the JSON contracts for their serialized form.
Independent of any external system.
"""
