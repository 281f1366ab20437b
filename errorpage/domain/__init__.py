"""
Domain layer package.

Contains the error classification policy and its collaborators' contracts.
No framework imports allowed in this layer.
"""
