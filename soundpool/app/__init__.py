"""
Application module for SoundPool (command line entry point).
"""
