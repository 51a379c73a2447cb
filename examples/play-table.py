from tabulary import DataKind, Table, mean, merge

shops = Table(
    [
        {"shop": "Shop 1", "city": "Rome", "employees": "10"},
        {"shop": "Shop 2", "city": "Milan", "employees": "15"},
        {"shop": "Shop 3", "city": "Rome", "employees": ""},
        {"shop": "Shop 3", "city": "Rome", "employees": ""},
    ]
)
shops.drop_duplicates(inplace=True)
shops.convert("employees", DataKind.INTEGER)

cities = Table({"city": ["Rome", "Milan"], "country": ["Italy", "Italy"]})

result = merge(shops, cities, ["city"])
print(result)
print()

in_rome = result.select_rows([city == "Rome" for city in result.select("city")])
print(in_rome)
print()

print("Average employees:", mean([v for v in result.select("employees") if v is not None]))
