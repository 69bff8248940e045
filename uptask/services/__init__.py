"""Services Layer — multi-step flows that combine persistence, core rules and IO.

Invariants:
    - Services raise UpTaskError subclasses; routes never build error responses
    - Services own the commit for the flow they run
"""
