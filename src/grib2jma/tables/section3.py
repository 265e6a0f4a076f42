table_3_0 = {
'0':'Specified in Code Table 3.1',
'1':'Predetermined Grid Definition - Defined by Originating Center',
'2-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'A grid definition does not apply to this product.',
}

table_3_1 = {
'0':'Latitude/Longitude',
'1':'Rotated Latitude/Longitude',
'2':'Stretched Latitude/Longitude',
'3':'Rotated and Stretched Latitude/Longitude',
'4-9':'Reserved',
'10':'Mercator',
'11-19':'Reserved',
'20':'Polar Stereographic Projection (Can be North or South)',
'21-29':'Reserved',
'30':'Lambert Conformal (Can be Secant, Tangent, Conical, or Bipolar)',
'31':'Albers Equal Area',
'32-39':'Reserved',
'40':'Gaussian Latitude/Longitude',
'41-89':'Reserved',
'90':'Space View Perspective or Orthographic',
'91-32767':'Reserved',
'32768-65534':'Reserved for Local Use',
'65535':'Missing',
}

table_3_2 = {
'0':'Earth assumed spherical with radius = 6,367,470.0 m',
'1':'Earth assumed spherical with radius specified (in m) by data producer',
'2':'Earth assumed oblate spheriod with size as determined by IAU in 1965 (major axis = 6,378,160.0 m, minor axis = 6,356,775.0 m, f = 1/297.0)',
'3':'Earth assumed oblate spheriod with major and minor axes specified (in km) by data producer',
'4':'Earth assumed oblate spheriod as defined in IAG-GRS80 model (major axis = 6,378,137.0 m, minor axis = 6,356,752.314 m, f = 1/298.257222101)',
'5':'Earth assumed represented by WGS84 (as used by ICAO since 1998) (Uses IAG-GRS80 as a basis)',
'6':'Earth assumed spherical with radius = 6,371,229.0 m',
'7':'Earth assumed oblate spheroid with major and minor axes specified (in m) by data producer',
'8':'Earth model assumed spherical with radius 6,371,200 m, but the horizontal datum of the resulting Latitude/Longitude field is the WGS84 reference frame',
'9':'Earth represented by the OSGB 1936 Datum, using the Airy_1830 Spheroid, the Greenwich meridian as 0 Longitude, the Newlyn datum as mean sea level, 0 height.',
'10-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}

table_3_11 = {
'0':'There is no appended list',
'1':'Numbers define number of points corresponding to full coordinate circles (i.e. parallels).  Coordinate values on each circle are multiple of the circle mesh, and extreme coordinate values given in grid definition may not be reached in all rows.',
'2':'Numbers define number of points corresponding to coordinate lines delimited by extreme coordinate values given in grid definition which are present in each row.',
'3':'Numbers define the actual latitudes for each row in the grid. The list of numbers are integer values of the valid latitudes in microdegrees (scale by 106) or in unit equal to the ratio of the basic angle and the subdivisions number for each row, in the same order as specified in the "scanning mode flag" (bit no. 2)',
'4-254':'Reserved',
'255':'Missing',
}

table_earth_params = {
'0':{'shape':'spherical','radius':6367470.0},
'1':{'shape':'spherical','radius':None},
'2':{'shape':'oblateSpheriod','major_axis':6378160.0,'minor_axis':6356775.0,'flattening':1.0/297.0},
'3':{'shape':'oblateSpheriod','major_axis':None,'minor_axis':None,'flattening':None},
'4':{'shape':'oblateSpheriod','major_axis':6378137.0,'minor_axis':6356752.314,'flattening':1.0/298.257222101},
'5':{'shape':'ellipsoid','major_axis':6378137.0,'minor_axis':6356752.3142,'flattening':1.0/298.257223563},
'6':{'shape':'spherical','radius':6371229.0},
'7':{'shape':'oblateSpheriod','major_axis':None,'minor_axis':None,'flattening':None},
'8':{'shape':'spherical','radius':6371200.0},
'9':{'shape':'ellipsoid','major_axis':6377563.396,'minor_axis':6356256.909,'flattening':1.0/299.3249646},
}
