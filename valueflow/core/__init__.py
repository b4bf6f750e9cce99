"""Core data model: syntax tree, types, values and scopes"""
