# stdlib
import math

def display_percentage(fraction: float) -> str:
    """
    Format a probability as a short percentage label for the legend.

    Parameters
    ----------
    fraction : float
        Probability in the range 0..1.

    Returns
    -------
    str
        ``"—"`` for non-finite input, three significant digits for
        values of at least 1%, two decimals down to 0.01%, and
        ``"<0.01%"`` below that.

    Examples
    --------
    >>> display_percentage(0.4523)
    '45.2%'
    >>> display_percentage(1.0)
    '100%'
    >>> display_percentage(0.0052)
    '0.52%'
    >>> display_percentage(0.00001)
    '<0.01%'
    """
    if not math.isfinite(fraction):
        return "—"
    percent = fraction * 100
    if percent >= 1:
        # Three significant digits without switching to exponent form
        rounded = float(f"{percent:.3g}")
        decimals = max(0, 2 - int(math.floor(math.log10(rounded))))
        return f"{rounded:.{decimals}f}%"
    elif percent >= 0.01:
        return f"{percent:.2f}%"
    else:
        return "<0.01%"
