"""
Priority Credit Registry

Role-hierarchy authorization and registry for the priority-credit program:
one administrator, the validators it appoints, and the project developers
those validators register.
"""

__version__ = "0.1.0"
