"""Salon Suite package.

Feature modules (capacity, staffing, meetings, kiosk, payroll, swaps, ...) each
carry a model, a repository Protocol with a MySQL implementation, a service
and a thin Flask controller.
"""
