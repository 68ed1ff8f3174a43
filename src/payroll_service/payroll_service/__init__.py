"""Payroll Service package.

REST backend for small-business payroll, organized by feature modules
(businesses, employees, shifts, payments, attendance, payroll) with a thin
Flask controller layer over service/repository layers, plus an HTTP client
and session helper for app-side callers.
"""
