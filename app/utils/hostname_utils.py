# app/utils/hostname_utils.py

def last_label(subdomain: str) -> str:
    """
    Returns the label that identifies an issued subdomain, e.g.
    "printer.3fa9c2e1" -> "3fa9c2e1". A caller may send the bare label,
    a deeper path or the full name under the zone.
    """
    return subdomain.split(".")[-1]
