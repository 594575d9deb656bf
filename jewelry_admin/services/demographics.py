"""
Customer demographics from order shipping addresses.

Each order's city/state is normalised and resolved to map coordinates
through static lookup tables: the city first, the state centroid when the
city is unknown. Counts are accumulated per city (city + state pair) and
per state.
"""
from typing import Any, Dict, Iterable, List, Optional

Coordinates = Dict[str, float]

CITY_COORDINATES: Dict[str, Coordinates] = {
    # Major cities
    "Mumbai": {"lat": 19.076, "lng": 72.8777},
    "Delhi": {"lat": 28.7041, "lng": 77.1025},
    "Bangalore": {"lat": 12.9716, "lng": 77.5946},
    "Hyderabad": {"lat": 17.385, "lng": 78.4867},
    "Chennai": {"lat": 13.0827, "lng": 80.2707},
    "Kolkata": {"lat": 22.5726, "lng": 88.3639},
    "Pune": {"lat": 18.5204, "lng": 73.8567},
    "Ahmedabad": {"lat": 23.0225, "lng": 72.5714},
    "Jaipur": {"lat": 26.9124, "lng": 75.7873},
    "Surat": {"lat": 21.1702, "lng": 72.8311},
    "Lucknow": {"lat": 26.8467, "lng": 80.9462},
    "Kanpur": {"lat": 26.4499, "lng": 80.3319},
    "Nagpur": {"lat": 21.1458, "lng": 79.0882},
    "Indore": {"lat": 22.7196, "lng": 75.8577},
    "Thane": {"lat": 19.2183, "lng": 72.9781},
    "Bhopal": {"lat": 23.2599, "lng": 77.4126},
    "Visakhapatnam": {"lat": 17.6869, "lng": 83.2185},
    "Pimpri": {"lat": 18.6298, "lng": 73.7997},
    "Patna": {"lat": 25.5941, "lng": 85.1376},
    "Vadodara": {"lat": 22.3072, "lng": 73.1812},
    "Ghaziabad": {"lat": 28.6692, "lng": 77.4538},
    "Ludhiana": {"lat": 30.901, "lng": 75.8573},
    "Agra": {"lat": 27.1767, "lng": 78.0081},
    "Nashik": {"lat": 19.9975, "lng": 73.7898},
    "Faridabad": {"lat": 28.4089, "lng": 77.3178},
    "Meerut": {"lat": 28.9845, "lng": 77.7064},
    "Rajkot": {"lat": 22.3039, "lng": 70.8022},
    "Varanasi": {"lat": 25.3176, "lng": 82.9739},
    "Srinagar": {"lat": 34.0837, "lng": 74.7973},
    "Amritsar": {"lat": 31.634, "lng": 74.8723},
    "Allahabad": {"lat": 25.4358, "lng": 81.8463},
    "Ranchi": {"lat": 23.3441, "lng": 85.3096},
    "Howrah": {"lat": 22.5958, "lng": 88.2636},
    "Coimbatore": {"lat": 11.0168, "lng": 76.9558},
    "Jabalpur": {"lat": 23.1815, "lng": 79.9864},
    "Gwalior": {"lat": 26.2183, "lng": 78.1828},
    "Vijayawada": {"lat": 16.5062, "lng": 80.648},
    "Jodhpur": {"lat": 26.2389, "lng": 73.0243},
    "Madurai": {"lat": 9.9252, "lng": 78.1198},
    "Raipur": {"lat": 21.2514, "lng": 81.6296},
    "Kota": {"lat": 25.2138, "lng": 75.8648},
    "Guwahati": {"lat": 26.1445, "lng": 91.7362},
    "Chandigarh": {"lat": 30.7333, "lng": 76.7794},
    "Thiruvananthapuram": {"lat": 8.5241, "lng": 76.9366},
    "Solapur": {"lat": 17.6599, "lng": 75.9064},
    "Hubballi": {"lat": 15.3647, "lng": 75.124},
    "Tiruchirappalli": {"lat": 10.7905, "lng": 78.7047},
    "Bareilly": {"lat": 28.367, "lng": 79.4304},
    "Mysore": {"lat": 12.2958, "lng": 76.6394},
    "Tiruppur": {"lat": 11.1075, "lng": 77.3398},
    "Gurgaon": {"lat": 28.4595, "lng": 77.0266},
    "Aligarh": {"lat": 27.8974, "lng": 78.088},
    "Jalandhar": {"lat": 31.326, "lng": 75.5762},
    "Bhubaneswar": {"lat": 20.2961, "lng": 85.8245},
    "Salem": {"lat": 11.6643, "lng": 78.146},
    "Warangal": {"lat": 17.9689, "lng": 79.5941},
    "Mira": {"lat": 19.2952, "lng": 72.8579},
    "Guntur": {"lat": 16.3067, "lng": 80.4365},
    "Bhiwandi": {"lat": 19.3009, "lng": 73.0643},
    "Saharanpur": {"lat": 29.968, "lng": 77.546},
    "Gorakhpur": {"lat": 26.7606, "lng": 83.3732},
    "Bikaner": {"lat": 28.0229, "lng": 73.3119},
    "Amravati": {"lat": 20.9374, "lng": 77.7796},
    "Noida": {"lat": 28.5355, "lng": 77.391},
    "Jamshedpur": {"lat": 22.8046, "lng": 86.2029},
    "Bhilai": {"lat": 21.2093, "lng": 81.3805},
    "Cuttack": {"lat": 20.5136, "lng": 85.883},
    "Firozabad": {"lat": 27.1591, "lng": 78.3957},
    "Kochi": {"lat": 9.9312, "lng": 76.2673},
    "Bhavnagar": {"lat": 21.7645, "lng": 72.1519},
    "Dehradun": {"lat": 30.3165, "lng": 78.0322},
    "Durgapur": {"lat": 23.5204, "lng": 87.3119},
    "Asansol": {"lat": 23.6739, "lng": 86.9524},
    "Nanded": {"lat": 19.1383, "lng": 77.321},
    "Kolhapur": {"lat": 16.705, "lng": 74.2433},
    "Ajmer": {"lat": 26.4499, "lng": 74.6399},
    "Gulbarga": {"lat": 17.3297, "lng": 76.8343},
    "Jamnagar": {"lat": 22.4707, "lng": 70.0577},
    "Ujjain": {"lat": 23.1765, "lng": 75.7885},
    "Loni": {"lat": 28.7521, "lng": 77.2887},
    "Siliguri": {"lat": 26.7271, "lng": 88.3953},
    "Jhansi": {"lat": 25.4484, "lng": 78.5685},
    "Ulhasnagar": {"lat": 19.2183, "lng": 73.1382},
    "Nellore": {"lat": 14.4426, "lng": 79.9865},
    "Jammu": {"lat": 32.7266, "lng": 74.857},
    "Belgaum": {"lat": 15.8497, "lng": 74.4977},
    "Mangalore": {"lat": 12.9141, "lng": 74.856},
    "Ambattur": {"lat": 13.1143, "lng": 80.1548},
    "Tirunelveli": {"lat": 8.7139, "lng": 77.7567},
    "Malegaon": {"lat": 20.5579, "lng": 74.5287},
    "Gaya": {"lat": 24.7955, "lng": 84.9994},
    "Udaipur": {"lat": 24.5854, "lng": 73.7125},
    "Maheshtala": {"lat": 22.5097, "lng": 88.2482},
    "Davanagere": {"lat": 14.4644, "lng": 75.9217},
    "Kozhikode": {"lat": 11.2588, "lng": 75.7804},
    "Akola": {"lat": 20.7002, "lng": 77.0082},
    "Kurnool": {"lat": 15.8281, "lng": 78.0373},
    "Bokaro": {"lat": 23.6693, "lng": 86.1511},
    "Rajahmundry": {"lat": 17.0005, "lng": 81.804},
    "Ballari": {"lat": 15.1394, "lng": 76.9214},
    "Agartala": {"lat": 23.8315, "lng": 91.2868},
    "Bhagalpur": {"lat": 25.2425, "lng": 86.9842},
    "Latur": {"lat": 18.3997, "lng": 76.5604},
    "Dhanbad": {"lat": 23.7957, "lng": 86.4304},
    "Rohtak": {"lat": 28.8955, "lng": 76.6066},
    "Korba": {"lat": 22.3595, "lng": 82.7501},
    "Bhilwara": {"lat": 25.3407, "lng": 74.6269},
    "Brahmapur": {"lat": 19.315, "lng": 84.7941},
    "Muzaffarpur": {"lat": 26.1225, "lng": 85.3906},
    "Ahmednagar": {"lat": 19.0948, "lng": 74.748},
}

# State capital or centroid, used when the city is not in the table
STATE_COORDINATES: Dict[str, Coordinates] = {
    "andhra pradesh": {"lat": 16.5062, "lng": 80.648},
    "arunachal pradesh": {"lat": 27.0844, "lng": 93.6053},
    "assam": {"lat": 26.1445, "lng": 91.7362},
    "bihar": {"lat": 25.5941, "lng": 85.1376},
    "chhattisgarh": {"lat": 21.2514, "lng": 81.6296},
    "goa": {"lat": 15.4909, "lng": 73.8278},
    "gujarat": {"lat": 23.0225, "lng": 72.5714},
    "haryana": {"lat": 28.4595, "lng": 77.0266},
    "himachal pradesh": {"lat": 31.1048, "lng": 77.1734},
    "jharkhand": {"lat": 23.3441, "lng": 85.3096},
    "karnataka": {"lat": 12.9716, "lng": 77.5946},
    "kerala": {"lat": 8.5241, "lng": 76.9366},
    "madhya pradesh": {"lat": 23.2599, "lng": 77.4126},
    "maharashtra": {"lat": 18.5204, "lng": 73.8567},
    "manipur": {"lat": 24.817, "lng": 93.9368},
    "meghalaya": {"lat": 25.5788, "lng": 91.8933},
    "mizoram": {"lat": 23.7271, "lng": 92.7176},
    "nagaland": {"lat": 25.6672, "lng": 94.1086},
    "odisha": {"lat": 20.2961, "lng": 85.8245},
    "punjab": {"lat": 30.7333, "lng": 76.7794},
    "rajasthan": {"lat": 26.9124, "lng": 75.7873},
    "sikkim": {"lat": 27.3314, "lng": 88.6138},
    "tamil nadu": {"lat": 13.0827, "lng": 80.2707},
    "telangana": {"lat": 17.385, "lng": 78.4867},
    "tripura": {"lat": 23.8315, "lng": 91.2868},
    "uttar pradesh": {"lat": 26.8467, "lng": 80.9462},
    "uttarakhand": {"lat": 30.3165, "lng": 78.0322},
    "west bengal": {"lat": 22.5726, "lng": 88.3639},
    "delhi": {"lat": 28.7041, "lng": 77.1025},
    "jammu and kashmir": {"lat": 34.0837, "lng": 74.7973},
    "ladakh": {"lat": 34.1526, "lng": 77.577},
    "andaman and nicobar islands": {"lat": 11.6234, "lng": 92.7265},
    "chandigarh": {"lat": 30.7333, "lng": 76.7794},
    "dadra": {"lat": 20.2763, "lng": 73.0169},
    "daman": {"lat": 20.3974, "lng": 72.8328},
    "lakshadweep": {"lat": 10.5667, "lng": 72.6417},
    "puducherry": {"lat": 11.9416, "lng": 79.8083},
    "daman and diu": {"lat": 20.3974, "lng": 72.8328},
    "dadra and nagar haveli": {"lat": 20.2763, "lng": 73.0169},
}

CITY_SYNONYMS = {
    "bengaluru": "bangalore",
    "bengalooru": "bangalore",
    "bombay": "mumbai",
    "calcutta": "kolkata",
    "madras": "chennai",
    "mangaluru": "mangalore",
    "mysuru": "mysore",
    "gurugram": "gurgaon",
    "pimpri-chinchwad": "pimpri",
    "trivandrum": "thiruvananthapuram",
    "prayagraj": "allahabad",
}

STATE_SYNONYMS = {
    "up": "uttar pradesh",
    "mp": "madhya pradesh",
    "uk": "uttarakhand",
    "tn": "tamil nadu",
    "wb": "west bengal",
    "orissa": "odisha",
    "dl": "delhi",
    "karnatak": "karnataka",
    "mh": "maharashtra",
    "gj": "gujarat",
}

ZIP_CODE_FIELDS = ["zipCode", "pincode", "pinCode", "postalCode"]
TOP_CITIES = 10

_CITY_LOOKUP = {name.lower(): coords for name, coords in CITY_COORDINATES.items()}


def normalize(value: Any) -> str:
    if not value or not isinstance(value, str):
        return ""
    return value.strip().lower()


def resolve_city_coords(city: str) -> Optional[Coordinates]:
    """Coordinates for a normalised city name, after synonym substitution."""
    if not city:
        return None
    return _CITY_LOOKUP.get(CITY_SYNONYMS.get(city, city))


def resolve_state_coords(state: str) -> Optional[Coordinates]:
    """Centroid for a normalised state name or abbreviation."""
    if not state:
        return None
    return STATE_COORDINATES.get(STATE_SYNONYMS.get(state, state))


def _display_name(raw: Any) -> str:
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return "Unknown"


def _zip_code(address: Dict[str, Any]) -> Optional[str]:
    for field in ZIP_CODE_FIELDS:
        if address.get(field):
            return str(address[field])
    return None


def build_demographics(orders: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Aggregate order shipping addresses into city and state statistics.

    Args:
        orders: Order documents, only ``shippingAddress`` is read

    Returns:
        Dict with totalOrders, uniqueLocations, cityStats, stateStats and
        topCities; stats are sorted by count, highest first
    """
    total_orders = 0
    cities: Dict[str, Dict[str, Any]] = {}
    states: Dict[str, Dict[str, Any]] = {}

    for order in orders:
        total_orders += 1
        address = order.get("shippingAddress")
        if not address:
            continue

        raw_city = address.get("city") or ""
        raw_state = address.get("state") or ""
        city_key = normalize(raw_city)
        state_key = normalize(raw_state)
        if not city_key and not state_key:
            continue

        display_city = _display_name(raw_city)
        display_state = _display_name(raw_state)
        coords = resolve_city_coords(city_key) or resolve_state_coords(state_key)

        city_entry = cities.setdefault(f"{display_city}-{display_state}", {
            "city": display_city,
            "state": display_state,
            "count": 0,
            "zipCodes": [],
            "coordinates": coords,
        })
        city_entry["count"] += 1
        zip_code = _zip_code(address)
        if zip_code and zip_code not in city_entry["zipCodes"]:
            city_entry["zipCodes"].append(zip_code)

        state_entry = states.setdefault(display_state, {
            "state": display_state,
            "count": 0,
            "cities": set(),
        })
        state_entry["count"] += 1
        state_entry["cities"].add(display_city)

    city_stats = sorted(cities.values(), key=lambda entry: entry["count"], reverse=True)
    state_stats: List[Dict[str, Any]] = sorted(
        ({**entry, "cities": len(entry["cities"])} for entry in states.values()),
        key=lambda entry: entry["count"],
        reverse=True,
    )

    return {
        "totalOrders": total_orders,
        "uniqueLocations": len(city_stats),
        "cityStats": city_stats,
        "stateStats": state_stats,
        "topCities": city_stats[:TOP_CITIES],
    }
