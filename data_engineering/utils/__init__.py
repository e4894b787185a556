"""Shared data engineering utilities"""
