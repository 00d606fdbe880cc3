"""Performance Evaluation System package.

This package is organized by feature modules (employees, evaluations,
suspensions, registrations, ...) with a thin Flask controller layer and
service/repository layers on top of a key/value "local storage".
"""
