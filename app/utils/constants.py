"""
Constants for Indian geography, name canonicalisation and device classification.
"""
from types import MappingProxyType

# State centroids (approximate lat/lng), used as map zoom targets
STATE_CENTROIDS = MappingProxyType({
    "Andhra Pradesh": {"lat": 15.9129, "lng": 79.7400},
    "Arunachal Pradesh": {"lat": 28.2180, "lng": 94.7278},
    "Assam": {"lat": 26.2006, "lng": 92.9376},
    "Bihar": {"lat": 25.0961, "lng": 85.3131},
    "Chhattisgarh": {"lat": 21.2787, "lng": 81.8661},
    "Goa": {"lat": 15.2993, "lng": 74.1240},
    "Gujarat": {"lat": 22.2587, "lng": 71.1924},
    "Haryana": {"lat": 29.0588, "lng": 76.0856},
    "Himachal Pradesh": {"lat": 31.1048, "lng": 77.1734},
    "Jharkhand": {"lat": 23.6102, "lng": 85.2799},
    "Karnataka": {"lat": 15.3173, "lng": 75.7139},
    "Kerala": {"lat": 10.8505, "lng": 76.2711},
    "Madhya Pradesh": {"lat": 22.9734, "lng": 78.6569},
    "Maharashtra": {"lat": 19.7515, "lng": 75.7139},
    "Manipur": {"lat": 24.6637, "lng": 93.9063},
    "Meghalaya": {"lat": 25.4670, "lng": 91.3662},
    "Mizoram": {"lat": 23.1645, "lng": 92.9376},
    "Nagaland": {"lat": 26.1584, "lng": 94.5624},
    "Odisha": {"lat": 20.9517, "lng": 85.0985},
    "Punjab": {"lat": 31.1471, "lng": 75.3412},
    "Rajasthan": {"lat": 27.0238, "lng": 74.2179},
    "Sikkim": {"lat": 27.5330, "lng": 88.5122},
    "Tamil Nadu": {"lat": 11.1271, "lng": 78.6569},
    "Telangana": {"lat": 18.1124, "lng": 79.0193},
    "Tripura": {"lat": 23.9408, "lng": 91.9882},
    "Uttar Pradesh": {"lat": 26.8467, "lng": 80.9462},
    "Uttarakhand": {"lat": 30.0668, "lng": 79.0193},
    "West Bengal": {"lat": 22.9868, "lng": 87.8550},
    "Andaman and Nicobar Islands": {"lat": 11.7401, "lng": 92.6586},
    "Chandigarh": {"lat": 30.7333, "lng": 76.7794},
    "Dadra and Nagar Haveli and Daman and Diu": {"lat": 20.4283, "lng": 72.8397},
    "Delhi": {"lat": 28.7041, "lng": 77.1025},
    "Jammu and Kashmir": {"lat": 33.7782, "lng": 76.5762},
    "Ladakh": {"lat": 34.1526, "lng": 77.5771},
    "Lakshadweep": {"lat": 10.5667, "lng": 72.6417},
    "Puducherry": {"lat": 11.9416, "lng": 79.8083},
})

# Geographic centre of India, last-resort marker position
INDIA_CENTROID = MappingProxyType({"lat": 20.5937, "lng": 78.9629})

# Exact pincode directory (built-in subset; a full table is loaded from
# settings.PINCODE_TABLE_PATH at start-up and merged over this one)
PINCODE_DIRECTORY = MappingProxyType({
    # Delhi
    "110001": {"state": "Delhi", "city": "New Delhi", "lat": 28.6139, "lng": 77.2090},
    "110002": {"state": "Delhi", "city": "Central Delhi", "lat": 28.6469, "lng": 77.2167},
    "110003": {"state": "Delhi", "city": "New Delhi", "lat": 28.6692, "lng": 77.2297},
    "110005": {"state": "Delhi", "city": "Central Delhi", "lat": 28.6431, "lng": 77.2197},
    "110006": {"state": "Delhi", "city": "Central Delhi", "lat": 28.6358, "lng": 77.2245},

    # Mumbai
    "400001": {"state": "Maharashtra", "city": "Mumbai", "lat": 18.9388, "lng": 72.8354},
    "400002": {"state": "Maharashtra", "city": "Mumbai", "lat": 18.9570, "lng": 72.8124},
    "400003": {"state": "Maharashtra", "city": "Mumbai", "lat": 18.9520, "lng": 72.8337},
    "400004": {"state": "Maharashtra", "city": "Mumbai", "lat": 18.9544, "lng": 72.8186},
    "400051": {"state": "Maharashtra", "city": "Mumbai", "lat": 19.0596, "lng": 72.8295},

    # Bengaluru
    "560001": {"state": "Karnataka", "city": "Bengaluru", "lat": 12.9716, "lng": 77.5946},
    "560002": {"state": "Karnataka", "city": "Bengaluru", "lat": 12.9634, "lng": 77.5855},
    "560003": {"state": "Karnataka", "city": "Bengaluru", "lat": 12.9698, "lng": 77.6025},
    "560004": {"state": "Karnataka", "city": "Bengaluru", "lat": 12.9539, "lng": 77.5937},
    "560005": {"state": "Karnataka", "city": "Bengaluru", "lat": 12.9591, "lng": 77.6089},

    # Chennai
    "600001": {"state": "Tamil Nadu", "city": "Chennai", "lat": 13.0827, "lng": 80.2707},
    "600002": {"state": "Tamil Nadu", "city": "Chennai", "lat": 13.0569, "lng": 80.2425},
    "600003": {"state": "Tamil Nadu", "city": "Chennai", "lat": 13.0732, "lng": 80.2609},
    "600004": {"state": "Tamil Nadu", "city": "Chennai", "lat": 13.0381, "lng": 80.2509},
    "600005": {"state": "Tamil Nadu", "city": "Chennai", "lat": 13.0732, "lng": 80.2384},

    # Kolkata
    "700001": {"state": "West Bengal", "city": "Kolkata", "lat": 22.5726, "lng": 88.3639},
    "700002": {"state": "West Bengal", "city": "Kolkata", "lat": 22.5448, "lng": 88.3426},
    "700003": {"state": "West Bengal", "city": "Kolkata", "lat": 22.5354, "lng": 88.3832},
    "700004": {"state": "West Bengal", "city": "Kolkata", "lat": 22.5354, "lng": 88.3832},
    "700005": {"state": "West Bengal", "city": "Kolkata", "lat": 22.5448, "lng": 88.3426},

    # Hyderabad
    "500001": {"state": "Telangana", "city": "Hyderabad", "lat": 17.3850, "lng": 78.4867},
    "500002": {"state": "Telangana", "city": "Hyderabad", "lat": 17.4065, "lng": 78.4691},
    "500003": {"state": "Telangana", "city": "Hyderabad", "lat": 17.3753, "lng": 78.4983},
    "500004": {"state": "Telangana", "city": "Hyderabad", "lat": 17.3616, "lng": 78.4747},
    "500005": {"state": "Telangana", "city": "Hyderabad", "lat": 17.4239, "lng": 78.4738},

    # Pune
    "411001": {"state": "Maharashtra", "city": "Pune", "lat": 18.5204, "lng": 73.8567},
    "411002": {"state": "Maharashtra", "city": "Pune", "lat": 18.5362, "lng": 73.8697},
    "411003": {"state": "Maharashtra", "city": "Pune", "lat": 18.5089, "lng": 73.8553},
    "411004": {"state": "Maharashtra", "city": "Pune", "lat": 18.5314, "lng": 73.8446},
    "411005": {"state": "Maharashtra", "city": "Pune", "lat": 18.5089, "lng": 73.8553},

    # Ahmedabad
    "380001": {"state": "Gujarat", "city": "Ahmedabad", "lat": 23.0225, "lng": 72.5714},
    "380002": {"state": "Gujarat", "city": "Ahmedabad", "lat": 23.0315, "lng": 72.5797},
    "380003": {"state": "Gujarat", "city": "Ahmedabad", "lat": 23.0204, "lng": 72.5797},
    "380004": {"state": "Gujarat", "city": "Ahmedabad", "lat": 23.0315, "lng": 72.5797},
    "380005": {"state": "Gujarat", "city": "Ahmedabad", "lat": 23.0204, "lng": 72.5797},

    # Jaipur
    "302001": {"state": "Rajasthan", "city": "Jaipur", "lat": 26.9124, "lng": 75.7873},
    "302002": {"state": "Rajasthan", "city": "Jaipur", "lat": 26.9239, "lng": 75.8267},
    "302003": {"state": "Rajasthan", "city": "Jaipur", "lat": 26.9239, "lng": 75.8267},
    "302004": {"state": "Rajasthan", "city": "Jaipur", "lat": 26.9239, "lng": 75.8267},
    "302005": {"state": "Rajasthan", "city": "Jaipur", "lat": 26.9239, "lng": 75.8267},

    # Lucknow
    "226001": {"state": "Uttar Pradesh", "city": "Lucknow", "lat": 26.8467, "lng": 80.9462},
    "226023": {"state": "Uttar Pradesh", "city": "Lucknow", "lat": 26.8467, "lng": 80.9462},
})

# Two-digit pincode prefix -> approximate centre of the postal circle
PINCODE_PREFIX_CENTERS = MappingProxyType({
    "11": {"state": "Delhi", "lat": 28.6139, "lng": 77.2090},
    "12": {"state": "Haryana", "lat": 29.0588, "lng": 76.0856},
    "13": {"state": "Haryana", "lat": 29.0588, "lng": 76.0856},
    "14": {"state": "Punjab", "lat": 30.7333, "lng": 76.7794},
    "15": {"state": "Punjab", "lat": 30.7333, "lng": 76.7794},
    "16": {"state": "Chandigarh", "lat": 30.7333, "lng": 76.7794},
    "17": {"state": "Himachal Pradesh", "lat": 31.1048, "lng": 77.1734},
    "18": {"state": "Jammu and Kashmir", "lat": 33.7782, "lng": 76.5762},
    "19": {"state": "Jammu and Kashmir", "lat": 33.7782, "lng": 76.5762},
    "20": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "21": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "22": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "23": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "24": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "25": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "26": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "27": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "28": {"state": "Uttar Pradesh", "lat": 26.8467, "lng": 80.9462},
    "30": {"state": "Rajasthan", "lat": 26.9124, "lng": 75.7873},
    "31": {"state": "Rajasthan", "lat": 27.0238, "lng": 74.2179},
    "32": {"state": "Rajasthan", "lat": 27.0238, "lng": 74.2179},
    "33": {"state": "Rajasthan", "lat": 27.0238, "lng": 74.2179},
    "34": {"state": "Rajasthan", "lat": 27.0238, "lng": 74.2179},
    "36": {"state": "Gujarat", "lat": 22.2587, "lng": 71.1924},
    "37": {"state": "Gujarat", "lat": 22.2587, "lng": 71.1924},
    "38": {"state": "Gujarat", "lat": 23.0225, "lng": 72.5714},
    "39": {"state": "Gujarat", "lat": 22.2587, "lng": 71.1924},
    "40": {"state": "Maharashtra", "lat": 19.0760, "lng": 72.8777},
    "41": {"state": "Maharashtra", "lat": 19.7515, "lng": 75.7139},
    "42": {"state": "Maharashtra", "lat": 19.7515, "lng": 75.7139},
    "43": {"state": "Maharashtra", "lat": 19.7515, "lng": 75.7139},
    "44": {"state": "Maharashtra", "lat": 19.7515, "lng": 75.7139},
    "45": {"state": "Madhya Pradesh", "lat": 22.9734, "lng": 78.6569},
    "46": {"state": "Madhya Pradesh", "lat": 22.9734, "lng": 78.6569},
    "47": {"state": "Madhya Pradesh", "lat": 22.9734, "lng": 78.6569},
    "48": {"state": "Madhya Pradesh", "lat": 22.9734, "lng": 78.6569},
    "49": {"state": "Chhattisgarh", "lat": 21.2787, "lng": 81.8661},
    "50": {"state": "Telangana", "lat": 17.3850, "lng": 78.4867},
    "51": {"state": "Andhra Pradesh", "lat": 15.9129, "lng": 79.7400},
    "52": {"state": "Andhra Pradesh", "lat": 15.9129, "lng": 79.7400},
    "53": {"state": "Andhra Pradesh", "lat": 15.9129, "lng": 79.7400},
    "56": {"state": "Karnataka", "lat": 12.9716, "lng": 77.5946},
    "57": {"state": "Karnataka", "lat": 15.3173, "lng": 75.7139},
    "58": {"state": "Karnataka", "lat": 15.3173, "lng": 75.7139},
    "59": {"state": "Karnataka", "lat": 15.3173, "lng": 75.7139},
    "60": {"state": "Tamil Nadu", "lat": 13.0827, "lng": 80.2707},
    "61": {"state": "Tamil Nadu", "lat": 11.1271, "lng": 78.6569},
    "62": {"state": "Tamil Nadu", "lat": 11.1271, "lng": 78.6569},
    "63": {"state": "Tamil Nadu", "lat": 11.1271, "lng": 78.6569},
    "64": {"state": "Tamil Nadu", "lat": 11.1271, "lng": 78.6569},
    "67": {"state": "Kerala", "lat": 10.8505, "lng": 76.2711},
    "68": {"state": "Kerala", "lat": 10.8505, "lng": 76.2711},
    "69": {"state": "Kerala", "lat": 10.8505, "lng": 76.2711},
    "70": {"state": "West Bengal", "lat": 22.5726, "lng": 88.3639},
    "71": {"state": "West Bengal", "lat": 22.9868, "lng": 87.8550},
    "72": {"state": "West Bengal", "lat": 22.9868, "lng": 87.8550},
    "73": {"state": "West Bengal", "lat": 22.9868, "lng": 87.8550},
    "74": {"state": "West Bengal", "lat": 22.9868, "lng": 87.8550},
    "75": {"state": "Odisha", "lat": 20.9517, "lng": 85.0985},
    "76": {"state": "Odisha", "lat": 20.9517, "lng": 85.0985},
    "77": {"state": "Odisha", "lat": 20.9517, "lng": 85.0985},
    "78": {"state": "Assam", "lat": 26.2006, "lng": 92.9376},
    "80": {"state": "Bihar", "lat": 25.0961, "lng": 85.3131},
    "81": {"state": "Bihar", "lat": 25.0961, "lng": 85.3131},
    "82": {"state": "Jharkhand", "lat": 23.6102, "lng": 85.2799},
    "83": {"state": "Jharkhand", "lat": 23.6102, "lng": 85.2799},
    "84": {"state": "Bihar", "lat": 25.0961, "lng": 85.3131},
    "85": {"state": "Bihar", "lat": 25.0961, "lng": 85.3131},
})

# Country spellings that need more than title-casing (keys are upper-case)
COUNTRY_ALIASES = MappingProxyType({
    "IN": "India",
    "USA": "United States",
    "US": "United States",
    "UNITED STATES OF AMERICA": "United States",
    "UK": "United Kingdom",
    "UNITED KINGDOM": "United Kingdom",
    "UAE": "United Arab Emirates",
    "UNITED ARAB EMIRATES": "United Arab Emirates",
})

# Kept lower-case unless they open the name ("Jammu and Kashmir")
CONNECTOR_WORDS = frozenset([
    "and", "of", "the", "in", "on", "at", "to", "for", "by", "with",
])

# Country values the upstream API uses for "not set"
UNKNOWN_COUNTRY_VALUES = frozenset(["unknown", "null"])

UNKNOWN = "Unknown"
INDIA = "India"

# Organization type rules, evaluated in order; first keyword hit wins
ORG_TYPE_RULES = (
    ("school", ("school",)),
    ("coaching", ("coaching", "tuition")),
    ("college", ("college", "university")),
    ("corporate", ("personal", "home", "others", "corporate", "business")),
)
ORG_TYPE_FALLBACK = "others"
ORG_TYPES = [category for category, _ in ORG_TYPE_RULES] + [ORG_TYPE_FALLBACK]

# Linking source -> breakdown bucket
LINKING_SOURCES = MappingProxyType({
    "IFP": "ifp",
    "ADMIN_WEB": "web",
    "CUSTOMER_ONBOARD_MOBILE": "mobile",
})
LINKING_SOURCE_OTHER = "other"

# Timestamps above this are taken to be milliseconds
MILLISECOND_THRESHOLD = 10_000_000_000
