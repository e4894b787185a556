"""Report figures and HTML report generation"""
