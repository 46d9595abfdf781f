"""Metric resolution, OTLP/HTTP export and scheduling"""
