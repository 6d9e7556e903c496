"""Domain discovery services"""
