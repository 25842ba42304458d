"""
Activations module - License validation and device slots.

This module handles:
- Activation entity (one machine bound to one license)
- The validation decision sequence
- Claiming and releasing device slots
"""
