"""Project configuration: paths and analysis constants"""
