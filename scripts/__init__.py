"""Pipeline orchestration scripts"""
