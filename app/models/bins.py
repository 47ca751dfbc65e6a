from typing import Dict
from app.models import BinCategory, BinInfo

BINS: Dict[BinCategory, BinInfo] = {
    BinCategory.RECYCLING: BinInfo(
        category=BinCategory.RECYCLING,
        name="Recycling Bin",
        description="This item can be recycled. Please rinse before disposing.",
        color="#4CAF50",
        icon="♻️",
    ),
    BinCategory.PLASTIC: BinInfo(
        category=BinCategory.PLASTIC,
        name="Plastic Recycling",
        description="Recyclable plastic. Check for recycling symbols.",
        color="#2196F3",
        icon="🔵",
    ),
    BinCategory.LANDFILL: BinInfo(
        category=BinCategory.LANDFILL,
        name="Landfill",
        description="This item should go to landfill waste.",
        color="#757575",
        icon="🗑️",
    ),
    BinCategory.COMPOST: BinInfo(
        category=BinCategory.COMPOST,
        name="Compost Bin",
        description="Organic waste. Can be composted.",
        color="#8D6E63",
        icon="🌱",
    ),
    BinCategory.HAZARDOUS: BinInfo(
        category=BinCategory.HAZARDOUS,
        name="Hazardous Waste",
        description="Special disposal required. Take to hazardous waste facility.",
        color="#F44336",
        icon="⚠️",
    ),
    BinCategory.PAPER: BinInfo(
        category=BinCategory.PAPER,
        name="Paper Recycling",
        description="Recyclable paper products.",
        color="#FF9800",
        icon="📄",
    ),
    BinCategory.GLASS: BinInfo(
        category=BinCategory.GLASS,
        name="Glass Recycling",
        description="Recyclable glass. Remove caps and lids.",
        color="#00BCD4",
        icon="🫙",
    ),
    BinCategory.METAL: BinInfo(
        category=BinCategory.METAL,
        name="Metal Recycling",
        description="Recyclable metal. Aluminum and steel cans.",
        color="#9E9E9E",
        icon="🔘",
    ),
}


def get_bin(category: BinCategory) -> BinInfo:
    return BINS[category]
