"""Command line interface package"""
