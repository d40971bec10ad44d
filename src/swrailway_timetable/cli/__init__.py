"""Command line interface for the railway timetable client."""
