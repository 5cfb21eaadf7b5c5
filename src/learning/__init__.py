"""
Learning domain library: quiz grading, progress, gamification and recommendation
formatting. No api or database deps; collaborators are passed in by the caller.
"""
