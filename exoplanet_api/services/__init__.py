"""Services Layer — orchestration between core rules and the record store.

Invariants:
    - One service class per aggregate (AnalysisService)
    - Services own transactions; routes never commit

Design Decisions:
    - Repository injected through the constructor: tests swap in fakes without patching
"""
