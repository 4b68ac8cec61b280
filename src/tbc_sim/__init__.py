"""tbc-sim -- a headless turn-based combat simulator.

The combat resolution engine lives in :mod:`tbc_sim.sim`; balance analysis
over batch runs lives in :mod:`tbc_sim.balance`.
"""

__version__ = "0.1.0"
