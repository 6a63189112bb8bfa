"""
Evaluations screen: single-record CRUD plus bulk spreadsheet import.
"""
