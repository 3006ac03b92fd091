"""
Literal file payloads written into a generated game project
"""
