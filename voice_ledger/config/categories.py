"""
Category taxonomy and keyword tables.

Keyword tables are ordered: the first keyword found in the lower-cased
transcript wins. Indonesian and English keywords share one table.
"""
from typing import Dict, Optional, Tuple

OTHER = "Other"

INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investment",
    "Bonus",
    "Gift",
    OTHER,
)

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Transport",
    "Shopping",
    "Entertainment",
    "Health",
    "Education",
    "Bills",
    OTHER,
)

INCOME_KEYWORDS: Tuple[str, ...] = (
    # Indonesian
    "terima", "dapat", "gaji", "bonus", "hadiah", "untung", "masuk",
    # English
    "receive", "get", "salary", "gift", "profit", "income",
)

EXPENSE_KEYWORDS: Tuple[str, ...] = (
    # Indonesian
    "beli", "bayar", "buat", "keluar", "habis",
    # English
    "spend", "buy", "bought", "pay", "cost",
)

CATEGORY_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    # Income
    ("salary", "Salary"),
    ("gaji", "Salary"),
    ("freelance", "Freelance"),
    ("project", "Freelance"),
    ("proyek", "Freelance"),
    ("dividend", "Investment"),
    ("dividen", "Investment"),
    ("investment", "Investment"),
    ("investasi", "Investment"),
    ("saham", "Investment"),
    ("stock", "Investment"),
    ("bonus", "Bonus"),
    ("gift", "Gift"),
    ("hadiah", "Gift"),
    # Expense
    ("makan", "Food"),
    ("food", "Food"),
    ("kopi", "Food"),
    ("coffee", "Food"),
    ("nasi", "Food"),
    ("rice", "Food"),
    ("lunch", "Food"),
    ("dinner", "Food"),
    ("breakfast", "Food"),
    ("bensin", "Transport"),
    ("gas", "Transport"),
    ("fuel", "Transport"),
    ("ojek", "Transport"),
    ("ride", "Transport"),
    ("taxi", "Transport"),
    ("bus", "Transport"),
    ("train", "Transport"),
    ("grab", "Transport"),
    ("gojek", "Transport"),
    ("baju", "Shopping"),
    ("clothes", "Shopping"),
    ("sepatu", "Shopping"),
    ("shoes", "Shopping"),
    ("belanja", "Shopping"),
    ("shopping", "Shopping"),
    ("movie", "Entertainment"),
    ("film", "Entertainment"),
    ("bioskop", "Entertainment"),
    ("game", "Entertainment"),
    ("concert", "Entertainment"),
    ("doctor", "Health"),
    ("dokter", "Health"),
    ("obat", "Health"),
    ("medicine", "Health"),
    ("hospital", "Health"),
    ("pharmacy", "Health"),
    ("school", "Education"),
    ("sekolah", "Education"),
    ("course", "Education"),
    ("kursus", "Education"),
    ("book", "Education"),
    ("buku", "Education"),
    ("tuition", "Education"),
    ("listrik", "Bills"),
    ("electricity", "Bills"),
    ("water", "Bills"),
    ("pdam", "Bills"),
    ("internet", "Bills"),
    ("pulsa", "Bills"),
    ("tagihan", "Bills"),
    ("bill", "Bills"),
    ("sewa", "Bills"),
)

# Category names used by the Indonesian UI copy
CATEGORY_ALIASES: Dict[str, str] = {
    "gaji": "Salary",
    "investasi": "Investment",
    "hadiah": "Gift",
    "makanan": "Food",
    "transportasi": "Transport",
    "belanja": "Shopping",
    "hiburan": "Entertainment",
    "kesehatan": "Health",
    "pendidikan": "Education",
    "tagihan": "Bills",
    "lainnya": OTHER,
}


def categories_for(transaction_type) -> Tuple[str, ...]:
    """
    Get the category taxonomy for a transaction type.

    Args:
        transaction_type: TransactionType or its string value

    Returns:
        Tuple of category names, always ending with "Other"
    """
    value = getattr(transaction_type, "value", transaction_type)
    if value == "income":
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def normalize_category(category: Optional[str], transaction_type) -> str:
    """
    Map a free-form category name onto the taxonomy of a transaction type.

    Matching is case-insensitive and accepts the Indonesian names.
    Anything outside the taxonomy becomes "Other".
    """
    if not category or not isinstance(category, str):
        return OTHER

    allowed = categories_for(transaction_type)
    key = category.strip().lower()
    key = CATEGORY_ALIASES.get(key, key).lower()

    for name in allowed:
        if name.lower() == key:
            return name

    return OTHER
