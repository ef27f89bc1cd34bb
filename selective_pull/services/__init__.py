"""Application services for selective-pull.

Services implement the decision logic, coordinating between the core types
(core/) and the external tools (git/, platform/).
"""
