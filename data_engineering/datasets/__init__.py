"""Analysis-ready dataset builders"""
