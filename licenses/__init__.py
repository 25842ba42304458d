"""
Licenses module - License keys, plans and payments.

This module handles:
- License key format and generation
- Plan device quotas and the License entity
- License creation, deactivation, listing and statistics
- Payments recorded against a license
"""
