"""Intent matching and command parsing.

The intent layer converts free-form (transcribed or typed) Italian/English text into a strict
`MatchResult`: the nearest catalogue command by sentence-embedding similarity, rejected below a
threshold, plus slot values extracted from the raw text by deterministic rules.
"""
