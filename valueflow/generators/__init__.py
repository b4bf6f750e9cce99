"""Text output for analysis results"""
