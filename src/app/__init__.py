"""
Interview campaign builder.

Campaign draft store service plus the campaign creation wizard that drives it.
"""
