"""
MacMan backend Django project.
"""
