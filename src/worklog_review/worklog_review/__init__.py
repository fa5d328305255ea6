"""Work log review package.

Feature modules (worklogs, weeks, review, feedback, team, deadlines) keep
the weekly submission workflow in plain service/repository layers, with a
thin Flask controller layer on top.
"""
