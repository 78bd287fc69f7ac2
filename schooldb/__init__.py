"""School records API: teachers, courses, students and test results."""
