"""Field Attendance package.

Feature modules (users, locations, assignments, attendance, leave, reports, ...)
share one attendance engine; Flask controllers and MySQL repositories are thin
adapters around the service layer.
"""
