"""calcengine: expression engine for a display-text calculator.

Turns the text a calculator display has accumulated (digits, ".", + - × ÷ ^ √
and parentheses) into a parse tree and folds it to a float. Structural
problems (LexError, ParseError) and undefined results (DivisionByZero,
DomainError, NumericOverflow) are separate exception families so the display
can react differently to each.

Usage:
    python -m calcengine eval "2+3×4"      # 14
    python -m calcengine tree "2^3^2"      # Show the parse tree

    >>> from calcengine.parser import parse
    >>> from calcengine.evaluator import evaluate
    >>> evaluate(parse("2×3^2"))
    18.0
"""
