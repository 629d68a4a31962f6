import frosts

REPORT = """Product,Jan,Feb,Mar,Total
Region: North (East),,,,
Apples,$10,$12,$8,$30
Pears,$4,$5,$6,$15
Region: South (West),,,,
Apples,$20,$18,$25,$63
Pears,$7,$,$9,$16
"""

df = frosts.read_csv(REPORT)


def fix_dollars(df, column):
    # "$10" -> 10.0, "$" or "" -> None
    df.replace_column(
        column,
        lambda v, _: float(v.lstrip("$")) if v.lstrip("$") else None,
        inplace=True,
    )


for month in ("Jan", "Feb", "Mar"):
    fix_dollars(df, month)

cleaned = (
    df.drop("Total")
    .encode_headers(
        "Region",
        lambda row: ":" in row.get_string("Product"),
        lambda row: row["Product"].split(": ")[1].split(" (")[0],
    )
    .melt_except("Month", "Sales", "Region", "Product")
)
print(cleaned)
print(cleaned.pivot("Region", "Month", "Sales", "sum"))
