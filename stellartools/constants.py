import astropy.units as u

# Solar reference values
SUN_TEMPERATURE_K = 5778.0
SUN_LIFETIME_GYR = 10.0

# Mass-luminosity relation: (upper mass bound, coefficient, exponent)
# The last band is open-ended and uses mass / LUMINOSITY_HIGH_MASS_SCALE.
LUMINOSITY_BANDS = (
    (0.43, 0.23, 2.3),
    (2.0, 1.0, 4.0),
    (55.0, 1.4, 3.5),
)
LUMINOSITY_HIGH_MASS_COEFFICIENT = 32000.0
LUMINOSITY_HIGH_MASS_SCALE = 20.0
LUMINOSITY_HIGH_MASS_EXPONENT = 1.0

RADIUS_EXPONENT = 0.78

# Stellar flux (solar units) at the habitable zone borders
HZ_INNER_FLUX = 1.107
HZ_OUTER_FLUX = 0.356

FROST_LINE_COEFFICIENT = 2.7

EARTH_LIKE_MIN_AGE_GYR = 3.5
EARTH_LIKE_MIN_MASS = 0.5
EARTH_LIKE_MAX_MASS = 1.4

# Spectral bands, hottest first: (letter, lower temperature bound, reference temperature, kelvin per step)
SPECTRAL_BANDS = (
    ("O", 30000.0, 50000.0, 2222.0),
    ("B", 10000.0, 30000.0, 2222.0),
    ("A", 7500.0, 10000.0, 278.0),
    ("F", 6000.0, 7500.0, 167.0),
    ("G", 5200.0, 6000.0, 89.0),
    ("K", 3700.0, 5200.0, 167.0),
    ("M", float("-inf"), 3700.0, 200.0),
)
MAX_SUBDIVISION = 9

MAX_STAR_NAME_LENGTH = 100
DEFAULT_STAR_MASS = 1.0
DEFAULT_STAR_AGE = 4.6

# Units
solDensity = u.def_unit("solDensity", u.solMass / u.solRad**3)

MASS_UNIT = u.solMass
AGE_UNIT = u.Gyr
LUMINOSITY_UNIT = u.solLum
RADIUS_UNIT = u.solRad
DENSITY_UNIT = solDensity
TEMPERATURE_UNIT = u.K
LIFETIME_UNIT = u.Gyr
DISTANCE_UNIT = u.AU
