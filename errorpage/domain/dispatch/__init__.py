"""
Dispatch bounded context.

Decides what happens when request dispatch or view rendering fails:
whether to act, whether to report upstream, and how the outgoing
result and response are shaped.
"""
