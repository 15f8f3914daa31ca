# planet_ephem/tables.py
"""
Orbital element tables, cut and pasted from their published sources.

JPL "Approximate Positions of the Planets"
(https://ssd.jpl.nasa.gov/planets/approx_pos.html):
  Table 1  - elements and rates, valid 1800 AD - 2050 AD
  Table 2a - elements and rates, valid 3000 BC - 3000 AD
  Table 2b - extra mean anomaly terms b, c, s, f for Jupiter..Neptune
JPL columns are a (au), e, I, L, long.peri., long.node (deg); rates per
Julian century past J2000.

Paul Schlyter, "How to compute planetary positions"
(https://www.stjarnhimlen.se/comp/ppcomp.html):
columns are a, e, i, M, w, N (deg); rates per day past 1999 Dec 31 0h.
The Sun row is the geocentric orbit of the Sun, the Moon's a is in
Earth radii.
"""

JPL_TABLE_1 = """
Mercury   0.38709927      0.20563593      7.00497902      252.25032350     77.45779628     48.33076593
          0.00000037      0.00001906     -0.00594749   149472.67411175      0.16047689     -0.12534081
Venus     0.72333566      0.00677672      3.39467605      181.97909950    131.60246718     76.67984255
          0.00000390     -0.00004107     -0.00078890    58517.81538729      0.00268329     -0.27769418
EM Bary   1.00000261      0.01671123     -0.00001531      100.46457166    102.93768193      0.0
          0.00000562     -0.00004392     -0.01294668    35999.37244981      0.32327364      0.0
Mars      1.52371034      0.09339410      1.84969142       -4.55343205    -23.94362959     49.55953891
          0.00001847      0.00007882     -0.00813131    19140.30268499      0.44441088     -0.29257343
Jupiter   5.20288700      0.04838624      1.30439695       34.39644051     14.72847983    100.47390909
         -0.00011607     -0.00013253     -0.00183714     3034.74612775      0.21252668      0.20469106
Saturn    9.53667594      0.05386179      2.48599187       49.95424423     92.59887831    113.66242448
         -0.00125060     -0.00050991      0.00193609     1222.49362201     -0.41897216     -0.28867794
Uranus   19.18916464      0.04725744      0.77263783      313.23810451    170.95427630     74.01692503
         -0.00196176     -0.00004397     -0.00242939      428.48202785      0.40805281      0.04240589
Neptune  30.06992276      0.00859048      1.77004347      -55.12002969     44.96476227    131.78422574
          0.00026291      0.00005105      0.00035372      218.45945325     -0.32241464     -0.00508664
"""

JPL_TABLE_2A = """
Mercury   0.38709843      0.20563661      7.00559432      252.25166724     77.45771895     48.33961819
          0.00000000      0.00002123     -0.00590158   149472.67486623      0.15940013     -0.12214182
Venus     0.72332102      0.00676399      3.39777545      181.97970850    131.76755713     76.67261496
         -0.00000026     -0.00005107      0.00043494    58517.81560260      0.05679648     -0.27274174
EM Bary   1.00000018      0.01673163     -0.00054346      100.46691572    102.93005885     -5.11260389
         -0.00000003     -0.00003661     -0.01337178    35999.37306329      0.31795260     -0.24123856
Mars      1.52371243      0.09336511      1.85181869       -4.56813164    -23.91744784     49.71320984
          0.00000097      0.00009149     -0.00724757    19140.29934243      0.45223625     -0.26852431
Jupiter   5.20248019      0.04853590      1.29861416       34.33479152     14.27495244    100.29282654
         -0.00002864      0.00018026     -0.00322699     3034.90371757      0.18199196      0.13024619
Saturn    9.54149883      0.05550825      2.49424102       50.07571329     92.86136063    113.63998702
         -0.00003065     -0.00032044      0.00451969     1222.11494724      0.54179478     -0.25015002
Uranus   19.18797948      0.04685740      0.77298127      314.20276625    172.43404441     73.96250215
         -0.00020455     -0.00001550     -0.00180155      428.49512595      0.09266985      0.05739699
Neptune  30.06952752      0.00895439      1.77005520      304.22289287     46.68158724    131.78635853
          0.00006447      0.00000818      0.00022400      218.46515314      0.01009938     -0.00606302
"""

JPL_TABLE_2B = """
Jupiter   -0.00012452    0.06064060   -0.35635438   38.35125000
Saturn     0.00025899   -0.13434469    0.87320147   38.35125000
Uranus     0.00058331   -0.97731848    0.17689245    7.67025000
Neptune   -0.00041348    0.68346318   -0.10162547    7.67025000
"""

SCHLYTER_TABLE = """
Sun      1.000000   0.016709  0.0000    356.0470      282.9404      0.00000
         0.000000  -1.151e-9  0.0000    0.9856002585  4.70935E-5    0.00000
Moon     60.2666    0.054900  5.1454    115.3654      318.0634      125.1228
         0.00000    0.000000  0.0000    13.0649929509 0.1643573223 -0.0529538083
Mercury  0.387098   0.205635  7.0047    168.6562      29.1241       48.3313
         0.000000   5.59E-10  5.00E-8   4.0923344368  1.01444E-5    3.24587E-5
Venus    0.723330   0.006773  3.3946    48.0052       54.8910       76.6799
         0.000000  -1.302E-9  2.75E-8   1.6021302244  1.38374E-5    2.46590E-5
Mars     1.523688   0.093405  1.8497    18.6021       286.5016      49.5574
         0.000000   2.516E-9 -1.78E-8   0.5240207766  2.92961E-5    2.11081E-5
Jupiter  5.20256    0.048498  1.3030    19.8950       273.8777      100.4542
         0.000000   4.469E-9 -1.557E-7  0.0830853001  1.64505E-5    2.76854E-5
Saturn   9.55475    0.055546  2.4886    316.9670      339.3939      113.6634
         0.000000  -9.499E-9 -1.081E-7  0.0334442282  2.97661E-5    2.38980E-5
Uranus   19.18171   0.047318  0.7733    142.5905      96.6612       74.0005
        -1.55E-8    7.45E-9   1.9E-8    0.011725806   3.0565E-5     1.3978E-5
Neptune  30.05826   0.008606  1.7700    260.2471      272.8461      131.7806
         3.313E-8   2.15E-9  -2.55E-7   0.005995147  -6.027E-6      3.0173E-5
"""

__all__ = ["JPL_TABLE_1", "JPL_TABLE_2A", "JPL_TABLE_2B", "SCHLYTER_TABLE"]
