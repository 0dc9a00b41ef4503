# launchboard/core/unit_economics.py
"""
Per-deal unit economics for a lead-funded brokerage.

Every figure is computed twice: once with a sales person closing the deal
for a share of the commission, once with the owner closing it alone.
"""
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Renewals carry half the early-default clawback exposure of a first deal
RENEWAL_CLAWBACK_FACTOR = 0.5


class UnitEconomicsInputs(BaseModel):
    """Calculator inputs; percentages are whole numbers (15 means 15%)"""
    model_config = ConfigDict(extra="forbid")

    cost_per_lead: float = Field(150, ge=25, le=500)
    conversion_rate: float = Field(15, ge=5, le=50)
    avg_deal_size: float = Field(75000, ge=25000, le=500000)
    commission_rate: float = Field(10, ge=5, le=20)
    use_sales_person: bool = True
    sales_person_pct: float = Field(35, ge=20, le=60)
    processing_fee: float = Field(2, ge=0, le=5)
    monthly_overhead: float = Field(5000, ge=0, le=25000)
    deals_per_month: int = Field(10, ge=1, le=50)
    per_deal_fixed_costs: float = Field(150, ge=0, le=500)
    default_rate: float = Field(12, ge=0, le=30)
    clawback_pct: float = Field(100, ge=0, le=100)
    renewal_rate: float = Field(40, ge=0, le=80)
    avg_renewals: int = Field(2, ge=1, le=5)
    renewal_commission: float = Field(5, ge=2, le=15)


class CloseScenario(BaseModel):
    """Figures that depend on who closes the deal"""
    sales_commission: float
    clawback_risk: float
    net_profit: float
    final_profit: float
    total_investment: float
    roi: float
    effective_commission: float
    break_even_leads: Optional[int] = None
    monthly_profit: float
    cltv: float
    profit_per_lead: float
    total_costs: float


class UnitEconomicsResult(BaseModel):
    leads_needed_per_deal: float
    cost_per_acquisition: float
    gross_commission: float
    processing_cost: float
    overhead_per_deal: float
    revenue_per_lead: float
    renewal_value: float
    expected_renewals: float
    renewal_revenue: float
    renewal_clawback_risk: float
    with_sales: CloseScenario
    you_close: CloseScenario


def _break_even_leads(acquisition_costs: float, margin: float, leads_per_deal: float) -> Optional[int]:
    # No finite lead count pays back acquisition when each deal loses money
    if margin <= 0:
        return None
    return math.ceil(acquisition_costs / margin * leads_per_deal)


def calculate_unit_economics(inputs: UnitEconomicsInputs) -> UnitEconomicsResult:
    """Derive per-deal, monthly and lifetime figures from the inputs"""
    conversion = inputs.conversion_rate / 100
    default_exposure = (inputs.default_rate / 100) * (inputs.clawback_pct / 100)

    leads_needed = 100 / inputs.conversion_rate
    cpa = inputs.cost_per_lead * leads_needed
    gross = inputs.avg_deal_size * (inputs.commission_rate / 100)
    processing = inputs.avg_deal_size * (inputs.processing_fee / 100)
    fixed = inputs.per_deal_fixed_costs
    overhead = inputs.monthly_overhead / inputs.deals_per_month

    renewal_value = inputs.avg_deal_size * (inputs.renewal_commission / 100)
    expected_renewals = inputs.avg_renewals * (inputs.renewal_rate / 100)
    renewal_revenue = renewal_value * expected_renewals
    renewal_retained = 1 - default_exposure * RENEWAL_CLAWBACK_FACTOR

    def scenario(sales_share: float) -> CloseScenario:
        sales_commission = gross * sales_share
        kept = gross - sales_commission
        clawback = kept * default_exposure
        net = kept - cpa - processing - fixed - clawback
        final = net - overhead
        investment = cpa + processing + fixed + sales_commission + overhead
        effective = kept * (1 - default_exposure)
        renewal_kept = renewal_revenue * (1 - sales_share)

        return CloseScenario(
            sales_commission=sales_commission,
            clawback_risk=clawback,
            net_profit=net,
            final_profit=final,
            total_investment=investment,
            roi=(final / investment) * 100 if investment > 0 else 0.0,
            effective_commission=effective,
            break_even_leads=_break_even_leads(cpa + processing + fixed, effective - processing - fixed, leads_needed),
            monthly_profit=final * inputs.deals_per_month,
            cltv=effective + renewal_kept * renewal_retained,
            profit_per_lead=net * conversion,
            total_costs=cpa + processing + fixed + sales_commission + clawback + overhead,
        )

    sales_share = inputs.sales_person_pct / 100 if inputs.use_sales_person else 0.0

    return UnitEconomicsResult(
        leads_needed_per_deal=leads_needed,
        cost_per_acquisition=cpa,
        gross_commission=gross,
        processing_cost=processing,
        overhead_per_deal=overhead,
        revenue_per_lead=gross * conversion,
        renewal_value=renewal_value,
        expected_renewals=expected_renewals,
        renewal_revenue=renewal_revenue,
        renewal_clawback_risk=renewal_revenue * default_exposure * RENEWAL_CLAWBACK_FACTOR,
        with_sales=scenario(sales_share),
        you_close=scenario(0.0),
    )
