"""
Network modules for ``ctrnn``
"""
