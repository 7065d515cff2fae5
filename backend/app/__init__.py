"""GetEmpStatus Application Package: employee compensation status service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
