"""
pionext — bonding-curve pricing and trade simulation for project credits.

Subpackages:
- pionext.core: curve math, domain models, JSON contracts
- pionext.trading: trade simulation and quantity solver
- pionext.logging: structlog configuration
"""

__version__ = "0.1.0"
