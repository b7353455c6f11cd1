"""
MyTimetable – weekly course timetables built by dragging lecture blocks
and searching a lecture catalog.
"""
