"""Staff Presence package.

Attendance & presence tracking core organized by feature modules
(clock, reports, presence, directory) with service/repository layers
and a thin Flask controller layer on top.
"""
