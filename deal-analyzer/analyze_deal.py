"""CLI client for the Rendement API: posts a rental deal and prints a terminal report.

Usage:
    python deal-analyzer/analyze_deal.py --price 250000 --rent 1200 --ltv 75 --rate 3.5
    python deal-analyzer/analyze_deal.py --price 180000 --rental-type shortterm --occupancy 65 --adr 90 --down-payment 60000
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a value already on a 0-100 scale."""
    return f"{float(v):.2f}%"


def _euro(v) -> str:
    return f"€{float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_investment_summary(data: dict) -> None:
    _header("Investering")
    print(f"  Totale investering:   {_euro(data['total_investment'])}")
    print(f"  Eigen inbreng:        {_euro(data['own_capital'])}")
    print(f"  Hypotheek:            {_euro(data['loan_amount'])}")
    print(f"  Maandlast:            {_euro(data['monthly_payment'])}/mnd")


def print_kpis(data: dict) -> None:
    _header("Kengetallen (jaar 1)")
    print(f"  BAR:                  {_pct(data['bar'])}")
    print(f"  NAR:                  {_pct(data['nar'])}")
    print(f"  Cash-on-cash:         {_pct(data['cash_on_cash'])}")
    dscr = data.get("dscr")
    print(f"  DSCR:                 {'geen hypotheek' if dscr is None else f'{float(dscr):.2f}x'}")
    print(f"  IRR:                  {_pct(data['irr'])}")
    print(f"  Break-even bezetting: {_pct(data['break_even_occupancy'])}")


def print_cashflow_table(data: dict) -> None:
    rows = data.get("yearly_cashflows", [])
    if not rows:
        return
    _header("Kasstroom per jaar")
    print(
        f"  {'Jr':>3}  {'Bruto huur':>11}  {'OPEX':>10}  {'NOI':>11}  "
        f"{'Hypotheek':>10}  {'Netto':>10}  {'Cumulatief':>11}"
    )
    print(f"  {'---':>3}  {'-' * 11}  {'-' * 10}  {'-' * 11}  {'-' * 10}  {'-' * 10}  {'-' * 11}")
    for yr in rows:
        print(
            f"  {yr['year']:>3}  {_euro(yr['gross_rent']):>11}  {_euro(yr['opex']):>10}  "
            f"{_euro(yr['noi']):>11}  {_euro(yr['debt_service']):>10}  "
            f"{_euro(yr['net_cashflow']):>10}  {_euro(yr['cumulative_cashflow']):>11}"
        )


def print_exit(data: dict) -> None:
    exit_ = data.get("exit_analysis")
    if not exit_:
        return
    _header("Exit")
    print(f"  Marktwaarde:          {_euro(exit_['market_value'])}")
    print(f"  Restschuld:           {_euro(exit_['remaining_debt'])}")
    print(f"  Netto opbrengst:      {_euro(exit_['net_exit'])}")
    print(f"  Totaal rendement:     {_euro(exit_['total_return'])}")


def print_risk(data: dict) -> None:
    risk = data.get("risk")
    if not risk:
        return
    _header(f"Risico: {risk['level'].upper()} (score {risk['score']})")
    for reason in risk["reasons"]:
        print(f"  - {reason}")


# ── Main ─────────────────────────────────────────────────────────────────────

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Analyze a Portuguese rental deal via the Rendement API"
    )
    parser.add_argument("--price", type=Decimal, required=True, help="Purchase price")
    parser.add_argument("--imt", type=Decimal, help="Transfer tax paid")
    parser.add_argument("--notary", type=Decimal, help="Notary and registration fees")
    parser.add_argument("--renovation", type=Decimal, help="Renovation costs")
    parser.add_argument("--furnishing", type=Decimal, help="Furnishing costs")

    financing = parser.add_mutually_exclusive_group()
    financing.add_argument("--ltv", type=Decimal, help="Loan as %% of purchase price")
    financing.add_argument("--down-payment", type=Decimal, help="Down payment amount")
    parser.add_argument("--monthly-payment", type=Decimal, help="Manual monthly mortgage payment")
    parser.add_argument("--rate", type=Decimal, help="Annual interest rate in %%")
    parser.add_argument("--term", type=int, help="Loan term in years")

    parser.add_argument(
        "--rental-type",
        choices=["longterm", "shortterm", "mixed"],
        default=None,
        help="Rental model (default: longterm)",
    )
    parser.add_argument("--rent", type=Decimal, help="Long-term monthly rent")
    parser.add_argument("--occupancy", type=Decimal, help="Short-term occupancy %%")
    parser.add_argument("--adr", type=Decimal, help="Short-term average daily rate")

    parser.add_argument("--management", type=Decimal, help="Management fee, %% of rent")
    parser.add_argument("--maintenance", type=Decimal, help="Yearly maintenance")
    parser.add_argument("--imi", type=Decimal, help="Yearly IMI")
    parser.add_argument("--insurance", type=Decimal, help="Yearly insurance")
    parser.add_argument("--condo", type=Decimal, help="Monthly condominium fee")
    parser.add_argument("--utilities", type=Decimal, help="Monthly utilities")

    parser.add_argument("--rent-growth", type=Decimal, help="Rent growth %% per year")
    parser.add_argument("--cost-growth", type=Decimal, help="Cost growth %% per year")
    parser.add_argument("--value-growth", type=Decimal, help="Value growth %% per year")
    parser.add_argument("--years", type=int, help="Projection horizon in years")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    # Build payload; only include options that were given
    payload: dict = {"purchase_price": str(args.price)}

    field_map = {
        "imt": "imt",
        "notary": "notary_fees",
        "renovation": "renovation_costs",
        "furnishing": "furnishing_costs",
        "ltv": "ltv_pct",
        "down_payment": "down_payment",
        "monthly_payment": "manual_monthly_payment",
        "rate": "interest_rate",
        "term": "loan_term_years",
        "rental_type": "rental_type",
        "rent": "monthly_rent",
        "occupancy": "st_occupancy",
        "adr": "st_adr",
        "management": "management_pct",
        "maintenance": "maintenance_yearly",
        "imi": "imi_yearly",
        "insurance": "insurance_yearly",
        "condo": "condo_monthly",
        "utilities": "utilities_monthly",
        "rent_growth": "rent_growth",
        "cost_growth": "cost_growth",
        "value_growth": "value_growth",
        "years": "years",
    }
    for cli_name, api_name in field_map.items():
        val = getattr(args, cli_name)
        if val is not None:
            payload[api_name] = val if not isinstance(val, Decimal) else str(val)

    url = f"{args.api_url}/api/v1/analyze"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn rendement.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_investment_summary(data)
    print_kpis(data)
    print_cashflow_table(data)
    print_exit(data)
    print_risk(data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
