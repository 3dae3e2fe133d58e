import copy

import pytest

from tender_report.canvas import LayoutContext, ReportPDF
from tender_report.report_presets import get_theme

SAMPLE_PAYLOAD = {
    "meta": {
        "report_generated_at": "2025-03-05T10:30:00Z",
        "params_used": {
            "sellerName": "Acme Supplies Pvt Ltd",
            "department": "Ministry of Defence",
            "offeredItem": "Office chairs, steel almirahs",
            "days": 30,
            "limit": 50,
            "email": "ops@acme.example",
        },
    },
    "data": {
        "priceBand": {"highest": 2500000, "lowest": 50000, "average": 600000},
        "topPerformingStates": {
            "results": [
                {"state_name": "Delhi", "total_tenders": 120},
                {"state_name": "Maharashtra", "total_tenders": 80},
            ]
        },
        "topSellersByDept": {
            "results": [
                {"seller_name": "Rival Corp", "department": "Defence", "total_wins": 12, "total_value": 15000000},
                {"seller_name": "Beta Traders", "department": "Defence", "total_wins": 7, "total_value": 4200000},
            ]
        },
        "categoryListing": [
            {"category": "Furniture", "count": 40},
            {"category": "Stationery", "count": 10},
        ],
        "allDepartments": [
            {"department": "Department of Military Affairs", "total_tenders": 300},
            {"department": "Department of Health", "total_tenders": 120},
        ],
        "lowCompetitionBids": {
            "results": [
                {
                    "bid_number": "GEM/2025/B/1001",
                    "organisation": "Army HQ",
                    "quantity": 10,
                    "seller_count": "1",
                    "bid_end_ts": "2025-04-01T00:00:00Z",
                },
                {
                    "bid_number": "GEM/2025/B/1002",
                    "organisation": "Naval Dockyard",
                    "quantity": 25,
                    "seller_count": "2",
                    "bid_end_ts": "2025-02-01T00:00:00Z",
                },
            ]
        },
        "missedButWinnable": {
            "seller": "Acme Supplies Pvt Ltd",
            "recentWins": [
                {
                    "bid_number": "GEM/2025/B/0901",
                    "org": "Army HQ",
                    "dept": "Department of Military Affairs",
                    "ministry": "Ministry of Defence",
                    "quantity": 20,
                    "total_price": 1000000,
                    "ended_at": "2025-02-10T00:00:00Z",
                },
                {
                    "bid_number": "GEM/2025/B/0902",
                    "org": "Army HQ",
                    "dept": "Department of Military Affairs",
                    "quantity": 50,
                    "total_price": 2500000,
                    "ended_at": "2025-02-12T00:00:00Z",
                },
                {
                    "bid_number": "GEM/2025/B/0903",
                    "org": "AIIMS Delhi",
                    "dept": "Department of Health",
                    "quantity": 5,
                    "total_price": "500000",
                    "ended_at": "2025-02-20T00:00:00Z",
                },
            ],
            "marketWins": [
                {
                    "bid_number": "GEM/2025/B/0950",
                    "org": "Naval Dockyard",
                    "dept": "Department of Military Affairs",
                    "seller_name": "Rival Corp",
                    "quantity": 30,
                    "total_price": 1800000,
                    "ended_at": "2025-02-15T00:00:00Z",
                }
            ],
            "ai": {
                "strategy_summary": "Acme wins most often with Army formations; focus on repeat buyers.",
                "likely_wins": [
                    {
                        "offered_item": "Steel almirah",
                        "reason": "Similar quantities were won by peers at prices within your band.",
                        "matching_market_wins": [
                            {
                                "bid_number": "GEM/2025/B/0950",
                                "org": "Naval Dockyard",
                                "seller_name": "Rival Corp",
                                "quantity": 30,
                                "total_price": 1800000,
                                "ended_at": "2025-02-15T00:00:00Z",
                            }
                        ],
                    }
                ],
                "signals": {
                    "org_affinity": [{"org": "Army HQ", "signal": "2 wins in window"}],
                    "dept_affinity": [
                        {"dept": "Department of Military Affairs", "signal": "steady demand"},
                        {"dept": "Department of Health", "signal": "new buyer"},
                    ],
                    "ministry_affinity": [{"ministry": "Ministry of Defence", "signal": "repeat orders"}],
                    "quantity_ranges": ["10-50 units"],
                    "price_ranges": ["Rs 5 L - Rs 25 L"],
                },
                "guidance": {
                    "note": "Signals are directional.",
                    "next_steps": ["Bid on Naval Dockyard almirah tenders", "Register with AIIMS vendor portal"],
                    "expansion_areas": ["Naval formations", "Central hospitals"],
                },
            },
        },
    },
}


@pytest.fixture
def payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def empty_payload():
    return {"meta": {"params_used": {"sellerName": "Empty Co", "days": 0}}, "data": {}}


@pytest.fixture
def layout():
    theme = get_theme("corporate")
    pdf = ReportPDF(theme, "Acme Supplies Pvt Ltd", "05 Mar 2025")
    ctx = LayoutContext(pdf=pdf, theme=theme)
    ctx.open_cover()
    return ctx
