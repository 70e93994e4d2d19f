"""Workshop Attendance package.

Feature modules (attendance, staff, overrides, report) read an external
backend through thin repositories; the monthly reconciliation is computed
locally in the service layer and rendered by thin Flask controllers.
"""
