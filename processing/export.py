"""
Data Export - Flat Region/Year table of already-computed values.

PrimaryMetric / SecondaryMetric are GDP / PPP per capita in the context's
price basis; Ratio is always current-price GDP / PPP. Missing values are
left empty in the CSV.
"""

import pandas as pd

from .metrics import ratio_at

EXPORT_COLUMNS = ['Region', 'Year', 'PrimaryMetric', 'SecondaryMetric', 'Ratio']


def export_table(ctx, catalog) -> pd.DataFrame:
    """Rows for every selected region x every year in the chart range."""
    gdp = catalog.combined('gdp', ctx.basis)
    ppp = catalog.combined('ppp', ctx.basis)
    gdp_current = catalog.combined('gdp', 'current')
    ppp_current = catalog.combined('ppp', 'current')

    rows = []
    for code in ctx.selected:
        name = catalog.name_of(code)
        if name is None:
            continue
        for year in ctx.years:
            rows.append({
                'Region': name,
                'Year': year,
                'PrimaryMetric': gdp.value(code, year),
                'SecondaryMetric': ppp.value(code, year),
                'Ratio': ratio_at(gdp_current, ppp_current, code, year),
            })

    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    metric_columns = EXPORT_COLUMNS[2:]
    df[metric_columns] = df[metric_columns].astype(float)
    return df


def export_csv(ctx, catalog) -> str:
    df = export_table(ctx, catalog)
    return df.to_csv(index=False, na_rep='', float_format='%.4f')
