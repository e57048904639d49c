"""
Pronunciation coach service.
"""
