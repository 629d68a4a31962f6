import logging

import frosts

logging.basicConfig(level=logging.INFO)

df = frosts.open_csv("data/employees.csv")

print(df.describe())
print("Median age:", df.median("Age"))
print("Salary std dev:", df.std_dev("Salary"))

by_department = df.group_by("Department", {"Salary": ["mean", "std_dev", "min", "max"]})
print(by_department.sort_by("Salary_mean", ascending=False))

departments = frosts.DataFrame(
    [["Department", "Manager"], ["Engineering", "Liam"], ["HR", "Mia"], ["Sales", "Jack"]]
)
missing = df.validate_key(departments, "Department", errors="warn")
print("Departments without a manager:", sorted(set(missing)))
print(df.merge(departments, "Department", how="left").get_columns("Name", "Manager"))
