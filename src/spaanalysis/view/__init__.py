"""
The VIEW layer renders the figures and the console report.
It only consumes AnalysisResult and never computes anything itself.
"""
