"""Study Tracker dashboard: daily tasks, study hours and sleep hours."""

__version__ = "2.0.0"
