"""School Attendance package.

Organized by feature modules (users, profiles, attendance, reports) with a
thin Flask controller layer on top of service/repository layers.
"""
