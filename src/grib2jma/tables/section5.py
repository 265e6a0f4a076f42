table_5_0 = {
'0':'Grid Point Data - Simple Packing (see Template 5.0)',
'1':'Matrix Value at Grid Point - Simple Packing (see Template 5.1)',
'2':'Grid Point Data - Complex Packing (see Template 5.2)',
'3':'Grid Point Data - Complex Packing and Spatial Differencing (see Template 5.3)',
'4':'Grid Point Data - IEEE Floating Point Data  (see Template 5.4)',
'5-39':'Reserved',
'40':'Grid Point Data - JPEG2000 Compression (see Template 5.40)',
'41':'Grid Point Data - PNG Compression (see Template 5.41)',
'42-49':'Reserved',
'50':'Spectral Data - Simple Packing (see Template 5.50)',
'51':'Spectral Data - Complex Packing (see Template 5.51)',
'52-199':'Reserved',
'200':'Run Length Packing With Level Values (see Template 5.200)',
'201-49151':'Reserved',
'49152-65534':'Reserved for Local Use',
'65535':'Missing',
}

table_5_1 = {
'0':'Floating Point',
'1':'Integer',
'2-191':'Reserved',
'192-254':'Reserved for Local Use',
'255':'Missing',
}
