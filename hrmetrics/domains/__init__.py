"""Metric domains: workforce, talent, skills, attendance and recruiting."""
