"""Utilities Package"""
