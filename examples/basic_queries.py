import frosts

df = frosts.open_csv("data/employees.csv")

print("High salaries")
print(df.filter("Salary", lambda v: v > 100_000))

# Income tax is 30% of the income
income_tax = df.apply(lambda row: row.get_number("Income") * 0.3)
print(df.add_column("Income Tax", income_tax).get_columns("Name", "Income", "Income Tax"))

# Or let the spreadsheet compute it
print(df.add_formula_column("Income Tax", "=[@Income] * 0.3").head(3))

print(df.drop("SSN", "Address"))

frequencies = df.group_by(
    ["City", "Department"], {"Salary": ["mean", "count"]}
).rename({"Salary_mean": "Average Salary", "Salary_count": "Num Employees"})
print(frequencies.sort_by(["City", "Department"]))
