"""ClientDesk — a small CRM backend for freelancers.

Authenticated users manage their clients, projects, interaction logs and
reminders, and read a dashboard of aggregate statistics. Every row is owned
by exactly one user and never visible to anyone else.
"""

__version__ = "0.1.0"
